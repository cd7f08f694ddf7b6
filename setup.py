#!/usr/bin/env python3
"""
Reifegrad v1.0 - Setup Configuration
A scoring engine for CVSS v3.1 and Reifegrad (process maturity) metric vectors
with validation, severity ratings, XML export and report intake.
"""

from setuptools import setup, find_packages

# Read the README file
def read_readme():
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()

# Read requirements
def read_requirements():
    with open("requirements.txt", "r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="reifegrad",
    version="1.0.0",
    description="Scoring engine for CVSS v3.1 and Reifegrad metric vector strings",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Information Technology",
        "Intended Audience :: Developers",
        "Topic :: Security",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.9",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=21.0",
            "flake8>=3.8",
            "mypy>=0.800",
        ],
    },
    entry_points={
        "console_scripts": [
            "reifegrad=reifegrad.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords=[
        "cvss",
        "reifegrad",
        "maturity",
        "vulnerability",
        "security",
        "scoring",
        "assessment",
        "document-processing",
    ],
)
