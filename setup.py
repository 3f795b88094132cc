"""
Setup script for the cyclomatic package.
"""

from setuptools import setup, find_packages
import os

# Read the README
readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
if os.path.exists(readme_path):
    with open(readme_path, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = "Cyclomatic complexity for Rust source files."

setup(
    name="cyclomatic",
    version="0.1.0",
    author="Cyclomatic Team",
    author_email="cyclomatic@example.com",
    description="McCabe cyclomatic complexity for Rust source files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/cyclomatic/cyclomatic",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-rust>=0.23",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "mypy>=1.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cyclomatic=cyclomatic.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords="cyclomatic, complexity, mccabe, rust, static-analysis, tree-sitter",
    project_urls={
        "Bug Reports": "https://github.com/cyclomatic/cyclomatic/issues",
        "Source": "https://github.com/cyclomatic/cyclomatic",
    },
)
