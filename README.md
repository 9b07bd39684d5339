# poreflow

poreflow simulates one fluid displacing another in a two-dimensional
network of capillary tubes. The tubes run diagonally between the nodes
of a lattice. Each tube holds at most two menisci, which separate the
invading ("blue", fluid `0`) fluid from the defending ("grey", fluid `1`)
fluid. Each time step runs these stages:

1. Node pressures, including the capillary pressure across menisci, are
   solved from a linear system (`poreflow.pressure`, `poreflow.linear`).
2. Tube velocities are computed from the pressure differences
   (`poreflow.velocity`).
3. A time step is chosen so that no fluid moves more than a tenth of a
   tube length (`poreflow.timestep`).
4. Fluid is collected at the nodes, poured into the outgoing tubes
   (narrowest first), and the menisci are updated
   (`poreflow.displacement`).

The network state can be drawn as 24-bit BMP images.

## Installation

```
pip install .
```

poreflow has no runtime dependencies. To run the tests:

```
pip install .[test]
pytest
```

## Input files

By default the commands read from `run/input/` under the current
directory:

- `tradius.txt`: tube radii
- `tlength.txt`: tube lengths (read and checked for size, but the
  simulation takes each tube's length as `tube_length_const / r²`)
- `tmns.txt`: meniscus configuration, one entry per tube
- `simulation_config.txt`: physical parameters

Each table file starts with its row and column count, followed by the
cells in row order. Line breaks do not matter; the file is read as
whitespace-separated tokens. A 2 × 4 radius table looks like this:

```
2 4
1 1 1 1
1 2 2 1
```

A meniscus cell has four fields: the number of menisci (0, 1 or 2), the
fluid at the start of the tube (0 or 1), and two positions along the
tube between 0 and 1. Only the first `n` positions are used.

`simulation_config.txt` holds whitespace-separated `key=value` tokens
and must set all four keys:

```
sigma=0.0756
mu_water=0.001
mu_oil=0.001
total_volumetric_flow_rate=1000
```

The radius, length and meniscus tables must have the same dimensions.
If a file is missing, malformed or inconsistent, reading it raises
`poreflow.fileio.InputError`. The commands print that error and exit
with status 1.

## Commands

```
poreflow-simulate [--input DIR] [--output DIR] [--image-size N]
```

Runs the simulation until 1.1 times the pore volume has been injected.
Progress is printed in steps of 10 %. During the run the command writes
pairs of BMP snapshots, `pic-<n>.bmp` with tube thickness scaled by
radius and `stp-<n>.bmp` without scaling, into `<output>/plots/`. When
the run ends it also draws snapshots of the first moment after each
1000 time units and writes `sat-vs-x.txt`, the blue saturation of each
tube column, and `p_vs_t_rough.txt`, the injection pressure against
time, into the output folder. The output folder defaults to
`run/output/`. `mu_water` is used as the viscosity of fluid 0 and
`mu_oil` as the viscosity of fluid 1.

```
poreflow-plot [--input DIR] [--output DIR] [--image-size N]
```

Reads the input files and draws the current configuration as
`pic-1.bmp` and `stp-1.bmp`. The output folder defaults to
`run/output/plots`.

```
poreflow-radius-report [--input DIR]
```

Reads `tradius.txt` and prints, as tab-separated columns, the share of
r²-weighted volume in each radius class 2, 3, 4, 5 and 6. A tube
belongs to the first class `c` for which `r < c + 0.5`. A radius of
6.5 or more is reported as an error.

```
poreflow-makegen [--config FILE] [--output FILE]
```

Reads whitespace-separated source stems such as `exe/simulate`,
`network/mns` or `dst/head` from `makefilegen-config.txt` and writes a
Makefile to `build/Makefile`. The Makefile has `all`,
`necessary_compile`, `folder_check`, `run_program`, `force`, `clean`,
`edit`, one rule per executable and one rule per object file. Stems
under `exe/` become executables in `run/`, and stems named `head` are
shared headers.

## Using the library

```python
from poreflow.config import PhysicalParameters
from poreflow.dimension import Dimension
from poreflow.fileio import read_simulation_input
from poreflow.linear import gauss_elimination
from poreflow.simulation import simulate

dim = Dimension(2, 4)
print(dim.total_nodes(), dim.node_rows(), dim.node_cols(0))  # 9 3 3

# Solve a small augmented system [A | b].
print(gauss_elimination([[2.0, 1.0, 5.0], [1.0, 3.0, 10.0]]))  # [1.0, 3.0]

data = read_simulation_input("run/input/")
moments = simulate(
    data.tradius, data.tmns, data.dimension, PhysicalParameters(), "run/output/"
)
```

`simulate` returns a list of `MomentConfig` records, one per time step.
Each record holds the clock, the meniscus table, the injection
pressure, the injected volume, the flow rate and the blue volume.

Modules:

- `poreflow.config`: `PhysicalParameters`, `SimulationConfig`,
  `IncongenConfig` and `key=value` parsing (`ConfigError` on bad lines)
- `poreflow.dimension`: `Dimension` and `Tube`, the network topology
- `poreflow.meniscus`: `Meniscus`, the fluid arrangement inside one tube
- `poreflow.determine`, `poreflow.pressure`, `poreflow.velocity`,
  `poreflow.timestep`, `poreflow.displacement`: the simulation stages
- `poreflow.linear`: `gauss_elimination`, without pivoting, which raises
  `ValueError` on a zero pivot
- `poreflow.measure`: `wetting_fluid_proportion`, `fluid_proportion` and
  `FluidProportion`, for volume and capillary pressure inside and outside
  a region
- `poreflow.bmp`: `Bitmap`, `Colour` and `rainbow_scale`
- `poreflow.plot`: `render_with_radius`, `render_without_radius`,
  `plot_with_radius`, `plot_without_radius`
- `poreflow.fileio`: reading and writing tables and configs, and
  `write_fluid_ppr` for tab-separated reports
- `poreflow.printing`: plain-text views of tables for the terminal
- `poreflow.randomness`: `RandomSource`, seeded integer and
  decimal-fraction draws
- `poreflow.simulation`: the full run and its reports
- `poreflow.makegen`: the Makefile generator

## What poreflow does not do

poreflow does not generate initial conditions. `IncongenConfig` and
`read_incongen_config` parse an `incongen_config.txt`, but no command
turns it into input tables. Write `tradius.txt`, `tlength.txt` and
`tmns.txt` by hand, or build the tables in Python and save them with
`write_radius`, `write_length` and `write_mns` from `poreflow.fileio`.
poreflow has no interactive mode for editing the tables.