"""Generator of the project Makefile from a list of source stems."""

from __future__ import annotations

import argparse
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence

TARGET_OUTPUT = "build/Makefile"
PATH_SRC_FOLDER = "src/"
PATH_RUN_FOLDER = "run/"
PATH_BUILD_FOLDER = "build/"

TERMINAL_MKDIR = "mkdir -p "
TERMINAL_RMRF = "rm -rf "
TERMINAL_GEANY_OPEN = "geany -i "

COMPILE_COMMAND_OBJECT = "g++ -c -Wall -std=c++17 -Isrc/ "
COMPILE_COMMAND_EXE = "g++ "
INPUT_FILE_NAME = "makefilegen-config.txt"

TIMESTAMP_LINE = 'TIMESTAMP := $(shell date +"%Y%m%d_%H%M%S")'

FOLDER_EXIST_CHECK = [
    PATH_BUILD_FOLDER,
    PATH_RUN_FOLDER,
    PATH_RUN_FOLDER + "input",
    PATH_RUN_FOLDER + "output",
    PATH_RUN_FOLDER + "output-old",
    PATH_RUN_FOLDER + "output/simulation-data",
    PATH_RUN_FOLDER + "output/simulation-calculations",
    PATH_RUN_FOLDER + "output/plots",
    PATH_RUN_FOLDER + "output/plots/pressure",
    PATH_RUN_FOLDER + "output/plots/velocity",
    PATH_RUN_FOLDER + "output/plots/fluids-nothick",
    PATH_RUN_FOLDER + "output/plots/fluids-thick",
    PATH_RUN_FOLDER + "output/plots/saturation",
]


class FileKind(Enum):
    HEAD = "head"
    LIB = "lib"
    EXE = "exe"


def split_path(path: str) -> tuple[str, str]:
    """Split ``folder/name`` at the first slash; without one both are the path."""
    folder, sep, name = path.partition("/")
    if not sep:
        return path, path
    return folder, name


def file_kind(path: str) -> FileKind:
    folder, name = split_path(path)
    if folder == "exe":
        return FileKind.EXE
    if name == "head":
        return FileKind.HEAD
    return FileKind.LIB


def to_cpp(path: str) -> str:
    return PATH_SRC_FOLDER + path + ".cpp"


def to_head(path: str) -> str:
    return PATH_SRC_FOLDER + path + ".h"


def to_exe(path: str) -> str:
    return PATH_RUN_FOLDER + split_path(path)[1] + ".exe"


def to_object(path: str) -> str:
    folder, name = split_path(path)
    return f"{PATH_BUILD_FOLDER}{folder}_{name}.o"


def _of_kind(files: Iterable[str], kind: FileKind) -> list[str]:
    return [f for f in files if file_kind(f) is kind]


def list_exe(files: Iterable[str]) -> list[str]:
    return _of_kind(files, FileKind.EXE)


def list_lib(files: Iterable[str]) -> list[str]:
    return _of_kind(files, FileKind.LIB)


def list_head(files: Iterable[str]) -> list[str]:
    return _of_kind(files, FileKind.HEAD)


def list_object(files: Iterable[str]) -> list[str]:
    """Every file that compiles to an object: all but the shared headers."""
    return [f for f in files if file_kind(f) is not FileKind.HEAD]


def expand_with_extensions(path: str) -> list[str]:
    """The real source files behind a stem: its header and/or its .cpp."""
    kind = file_kind(path)
    expanded = []
    if kind is not FileKind.EXE:
        expanded.append(to_head(path))
    if kind is not FileKind.HEAD:
        expanded.append(to_cpp(path))
    return expanded


def _spaced(items: Iterable[str]) -> str:
    return "".join(" " + item for item in items)


def rule(name: str, deps: Sequence[str] = ()) -> str:
    """A target line, preceded by two blank lines."""
    return f"\n\n{name}:{_spaced(deps)}\n"


def echo(message: str) -> str:
    return f'\t@echo "{message}"\n'


def script(command: str) -> str:
    return f"\t{command}\n"


def read_file_structure(path: str | Path = INPUT_FILE_NAME) -> list[str]:
    """Whitespace-separated source stems from a file, sorted."""
    return sorted(Path(path).read_text().split())


def section_all() -> str:
    return rule("all", ["necessary_compile", "run_program"]) + echo(
        "Command executed = all"
    )


def section_run() -> str:
    return (
        rule("run_program", ["folder_check"])
        + script("./" + PATH_RUN_FOLDER + "simulate.exe")
        + script("./" + PATH_RUN_FOLDER + "plot.exe")
        + script("zip -r run/results-old/$(TIMESTAMP).zip run/output/")
    )


def section_folder_check() -> str:
    return (
        rule("folder_check")
        + script(TERMINAL_RMRF + "run/output")
        + "".join(script(TERMINAL_MKDIR + folder) for folder in FOLDER_EXIST_CHECK)
        + echo("Command executed = folder_check")
    )


def section_necessary_compile(files: Sequence[str]) -> str:
    deps = ["folder_check", *(to_exe(f) for f in list_exe(files))]
    return rule("necessary_compile", deps) + echo(
        "Command executed = necessary_compile"
    )


def section_force() -> str:
    return rule("force", ["clean", "necessary_compile"]) + echo(
        "Command executed = force"
    )


def section_clean() -> str:
    return rule("clean") + script(TERMINAL_RMRF + PATH_BUILD_FOLDER)


def section_edit(files: Sequence[str]) -> str:
    edit = [name for f in files for name in expand_with_extensions(f)]
    return rule("edit") + script(TERMINAL_GEANY_OPEN + _spaced(edit))


def section_exe(files: Sequence[str]) -> str:
    libs = [to_object(f) for f in list_lib(files)]
    parts = []
    for exe in list_exe(files):
        target = to_exe(exe)
        deps = [to_object(exe), *libs]
        parts.append(
            rule(target, deps)
            + script(COMPILE_COMMAND_EXE + _spaced(deps) + " -o " + target)
            + echo(target + " created.")
        )
    return "".join(parts)


def section_object(files: Sequence[str]) -> str:
    heads = [to_head(f) for f in list_head(files)]
    parts = []
    for source in list_object(files):
        target = to_object(source)
        deps = [*expand_with_extensions(source), *heads]
        parts.append(
            rule(target, deps)
            + script(COMPILE_COMMAND_OBJECT + to_cpp(source) + " -o " + target)
            + echo(target + " created.")
        )
    return "".join(parts)


def generate_makefile(files: Sequence[str]) -> str:
    """The whole Makefile text for the given source stems."""
    return "".join(
        [
            TIMESTAMP_LINE,
            section_all(),
            section_necessary_compile(files),
            section_folder_check(),
            section_run(),
            section_force(),
            section_clean(),
            section_edit(files),
            section_exe(files),
            section_object(files),
        ]
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate the project Makefile.")
    parser.add_argument("--config", default=INPUT_FILE_NAME, help="list of source stems")
    parser.add_argument("--output", default=TARGET_OUTPUT, help="Makefile to write")
    args = parser.parse_args(argv)

    files = read_file_structure(args.config)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(generate_makefile(files))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())