# setup.py
from setuptools import setup, find_packages

setup(
    name="pbdbtax",
    version="1.0.0",
    description="Higher taxonomy, age ranges and homonym checks for Paleobiology Database genera",
    author="pbdbtax Contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "pbdbtax=pbdbtax.cli:main",
        ],
    },
    install_requires=[
        "numpy>=1.11",
        "pandas>=1.1",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
)
