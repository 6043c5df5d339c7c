from setuptools import setup, find_packages

setup(
    name="savanna",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    description="Grid-based predator-prey ecosystem: plants grow and spread, animals age, hunt, breed and die, one occupant per cell.",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
