"""Two-phase flow simulation in pore networks of capillary tubes, with BMP plotting and a Makefile generator."""

__version__ = "0.1.0"