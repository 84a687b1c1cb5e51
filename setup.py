#!/usr/bin/env python3
"""
Setup configuration for GS1 EPC Translator
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="gs1-epc-translator",
    version="1.0.0",
    author="GS1 EPC Translator Team",
    author_email="",
    description="Translate GS1 identifiers between EPC URNs and GS1 Digital Link URIs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourrepo/gs1-epc-translator",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples", "scripts"]),
    package_data={
        "gs1_translator": [
            "data/*.json",
        ],
    },
    include_package_data=True,
    python_requires=">=3.7",
    install_requires=[
        # No external dependencies for core functionality
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gs1-translate=gs1_translator.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Intended Audience :: Manufacturing",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    keywords="gs1 epc epcis rfid digital-link urn sgtin sscc gtin",
    project_urls={
        "Documentation": "https://github.com/yourrepo/gs1-epc-translator/docs",
        "Source": "https://github.com/yourrepo/gs1-epc-translator",
        "Tracker": "https://github.com/yourrepo/gs1-epc-translator/issues",
    },
)
