"""
CDR Monitor package setup.
"""

from pathlib import Path
from setuptools import setup, find_packages

here = Path(__file__).parent

with open(here / "requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="cdr-monitor",
    version="1.0.0",
    description="Polling monitor that re-verifies call detail records against a CDR backend",
    packages=find_packages(include=["cdr_monitor", "cdr_monitor.*"], exclude=["cdr_monitor.tests", "cdr_monitor.tests.*"]),
    py_modules=["monitor"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Telecommunications Industry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "cdr-monitor=cdr_monitor.cli.monitor_cli:run",
        ],
    },
)
