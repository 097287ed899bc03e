from setuptools import setup, find_packages

setup(
    name="cachesim",
    version="1.0",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            #cli 'cachesim' -> cachesim/main.py:main()
            "cachesim=cachesim.main:main",
        ],
    },
    install_requires=[
        # build dependencies
        "setuptools",
        "wheel",
        # program dependencies
        "matplotlib",
        "jsonschema",
        "colorama"
    ],
    extras_require={
        "test": ["pytest"],
    },
)
