# setup.py
from setuptools import setup, find_packages

setup(
    name="monkey",
    version="0.1.0",
    description="Monkey language parser, tree-walking evaluator and macro system",
    packages=find_packages(include=["monkey", "monkey.*", "monkey_lsp", "monkey_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "monkey=monkey.__main__:main",
            "monkey-ls=monkey_lsp.server:main",
            "monkey-repl-server=monkey_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
