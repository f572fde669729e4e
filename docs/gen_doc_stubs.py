"""
Generate virtual doc files for the mkdocs site.

This script can also be run directly to actually write out those files,
as a preview.

All credit to the creators of:
https://oprypin.github.io/mkdocs-gen-files/
and the docs at:
https://mkdocstrings.github.io/crystal/quickstart/migrate.html
"""

from __future__ import annotations

import importlib
import pkgutil
from collections.abc import Iterable
from pathlib import Path

import mkdocs_gen_files
from attrs import define

from modelfile.docs import generate_parameter_docs

ROOT_DIR = Path("api")
nav = mkdocs_gen_files.Nav()


@define
class PackageInfo:
    """
    Package information used to help us auto-generate the docs
    """

    full_name: str
    stem: str
    summary: str


def write_subpackage_pages(package: object) -> tuple[PackageInfo, ...]:
    """
    Write pages for the modules of a package
    """
    sub_packages = []
    for _, name, _ in pkgutil.walk_packages(package.__path__):
        # Skip "private" modules
        if name.startswith("_"):
            continue
        sub_packages.append(write_module_page(f"{package.__name__}.{name}"))

    return tuple(sub_packages)


def get_write_file(package_full_name: str) -> Path:
    """Get the file a module's page is written to"""
    write_dir = ROOT_DIR
    for sub_dir in package_full_name.split(".")[:-1]:
        write_dir = write_dir / sub_dir

    return write_dir / package_full_name.split(".")[-1] / "index.md"


def create_sub_packages_table(sub_packages: Iterable[PackageInfo]) -> str:
    """Create the table summarising the modules"""
    sub_packages = list(sub_packages)
    links = [f"[{sp.stem}][{sp.full_name}]" for sp in sub_packages]
    module_header = "Module"
    module_width = max(len(v) for v in [module_header, *links])

    descriptions = [sp.summary for sp in sub_packages]
    description_header = "Description"
    description_width = max(len(v) for v in [description_header, *descriptions])

    lines = []
    rows = zip([module_header, *links], [description_header, *descriptions])
    for i, (module, description) in enumerate(rows):
        lines.append(
            f"| {module.ljust(module_width)} | {description.ljust(description_width)} |"
        )
        if i == 0:
            lines.append(f"| {'-' * module_width} | {'-' * description_width} |")

    return "\n".join(lines)


def write_module_page(package_full_name: str) -> PackageInfo:
    """
    Write the docs page for a module/package
    """
    package = importlib.import_module(package_full_name)

    sub_packages = (
        write_subpackage_pages(package) if hasattr(package, "__path__") else None
    )

    write_file = get_write_file(package_full_name)
    nav[package_full_name.split(".")] = write_file.relative_to(ROOT_DIR).as_posix()

    with mkdocs_gen_files.open(write_file, "w") as fh:
        fh.write(f"# {package_full_name}\n")

        if sub_packages:
            fh.write("\n")
            fh.write(f"{create_sub_packages_table(sub_packages)}\n")

        fh.write("\n")
        fh.write(f"::: {package_full_name}")

    doc_lines = (package.__doc__ or "").strip().splitlines()
    summary = doc_lines[0] if doc_lines else "No documentation available"

    return PackageInfo(package_full_name, package_full_name.split(".")[-1], summary)


# Write module pages
write_module_page("modelfile")

# Known parameter reference
with mkdocs_gen_files.open("parameters.md", "w") as fh:
    fh.write(generate_parameter_docs())

# Render navigation
with mkdocs_gen_files.open(ROOT_DIR / "NAVIGATION.md", "w") as fh:
    fh.writelines(nav.build_literate_nav(indentation=2))
