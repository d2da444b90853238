# setup.py
from setuptools import setup, find_packages

setup(
    name="llama",
    version="0.3.0",
    description="A small homoiconic macro language that expands templates into XML and JSON",
    packages=find_packages(include=["llama", "llama.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
