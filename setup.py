# A minimal setup.py file to make a Python project installable.

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name             = "hilbertie",
    version          = "0.1.0",
    description      = "D-dimensional Hilbert curve indexing",
    long_description = long_description,
    long_description_content_type = "text/markdown",
    packages         = setuptools.find_packages(),
    classifiers       = [
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
    ],
    python_requires  = '>= 3.8',
    install_requires = ["numpy", "numba"],
    extras_require   = {"test": ["pytest"]},
)
