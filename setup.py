"""
Setup configuration for the reactor core simulator.
"""

from setuptools import setup, find_packages

setup(
    name="reactor-core-sim",
    version="0.1.0",
    author="Nuclear Sim Team",
    description="Educational point-kinetics reactor core dynamics simulator",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
        "pandas>=1.3.0",
        "dataclass-wizard[yaml]>=0.22.0,<1.0",
        "PyYAML>=5.4",
        "rich>=10.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "reactor-sim=reactor_sim.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Physics",
    ],
)
