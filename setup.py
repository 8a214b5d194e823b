# setup.py
from setuptools import setup, find_packages

setup(
    name="formula",
    version="0.3.0",
    description="Hoists the free dependencies out of formula expressions",
    packages=find_packages(include=["formula", "formula.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["formula=formula.__main__:main"],
    },
    zip_safe=False,
)
