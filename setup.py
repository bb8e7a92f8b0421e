# setup.py
from setuptools import setup, find_packages

setup(
    name="jam",
    version="0.1.0",
    description="Call-by-value, call-by-name and call-by-need interpreter for the Jam language",
    packages=find_packages(include=["jam", "jam.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
