from setuptools import setup, find_packages

setup(
    name="spekta",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        "textual",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "spekta=spekta.cli:main",
        ],
    },
    description="Apply LLM SEARCH/REPLACE edits to files with whitespace-tolerant, atomic patching.",
)
