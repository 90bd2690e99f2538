"""
Setup script for mdbook2docx.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="mdbook2docx",
    version="0.1.0",
    description="Convert Markdown manuscripts with callouts, chat bubbles and diagrams into print-ready DOCX",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="mdbook2docx Contributors",
    author_email="",
    packages=find_packages(include=["mdbook2docx", "mdbook2docx.*"]),
    install_requires=[
        "python-docx>=1.1.0",
        "PyYAML>=6.0",
        "Pillow>=10.0.0",
        "cairosvg>=2.7.0",
        "mistune>=3.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mdbook2docx=mdbook2docx.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Text Processing :: Markup :: Markdown",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="markdown docx word manuscript book publishing cli mermaid",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
