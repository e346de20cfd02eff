"""Setup configuration for runtests tool."""

from setuptools import setup, find_packages

setup(
    name="runtests",
    version="0.1.0",
    description="Run unittest suites by name with console, log file and JUnit XML reporting",
    packages=find_packages(include=["runtests", "runtests.*"]),
    python_requires=">=3.12",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "runtests=runtests.cli:main",
        ],
    },
)
