from setuptools import find_packages, setup

setup(
    name="shape2d",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
