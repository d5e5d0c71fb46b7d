# setup.py
from setuptools import setup, find_packages

setup(
    name="macroeval",
    version="0.1.0",
    description="Confidence-tracking partial evaluator for compile-time JavaScript macros",
    packages=find_packages(include=["macroeval", "macroeval.*"]),
    python_requires=">=3.10",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-javascript>=0.23",
        "semantic-version>=2.10",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
