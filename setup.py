# setup.py
from setuptools import setup, find_packages

setup(
    name="pep_db",
    version="0.1.0",
    description="Minimal SQLite data-access layer with SQLAlchemy / sqlite3 driver probing",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "build",
            "dist",
        )
    ),
    install_requires=[
        "SQLAlchemy>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    python_requires=">=3.10",
)
