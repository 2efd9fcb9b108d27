from setuptools import setup, find_packages
import pathlib

# Detect layout
use_src = pathlib.Path("src/sheetgen").exists()
pkg_args = {"package_dir": {"": "src"}, "packages": find_packages(where="src")} if use_src \
           else {"packages": find_packages(where=".")}

setup(
    name="sheet-gen",
    version="0.1.0",
    include_package_data=True,
    package_data={"sheetgen": ["templates/*.j2"]},
    python_requires=">=3.9",
    install_requires=[
        "openpyxl>=3.1",
        "jinja2>=3.1",
        "pyyaml>=6.0",
        "pydantic>=2.0",
        "typer>=0.9",
    ],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["sheetgen=sheetgen.cli:app"]},
    **pkg_args
)
