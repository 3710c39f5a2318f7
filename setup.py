"""Setup script for store-checkout-sim."""

from setuptools import setup, find_packages

setup(
    name="store-checkout-sim",
    version="0.1.0",
    description="A SimPy-driven minute-by-minute simulation of a self-checkout area",
    author="Store Checkout Sim",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        "simpy",
        "numpy",
        "pandas",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "run-store-simulation=scripts.run_simulation:main",
        ],
    },
)
