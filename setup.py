# setup.py
from setuptools import setup, find_packages

setup(
    name="dojocompass",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "jdatetime",
        "python-dateutil",
        "PySide6",
        "matplotlib",
        "reportlab",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "dojocompass=dojocompass.main:run_wizard",
        ],
    },
)
