#!/usr/bin/env python3
"""
Setup script for Constellix Client package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="constellix-client",
    version="1.0.0",
    author="Constellix Client Team",
    author_email="team@example.com",
    description="Signed request client for the Constellix DNS and Sonar APIs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/constellix-client",
    packages=find_packages(exclude=["features", "features.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Internet :: Name Service (DNS)",
        "Topic :: System :: Systems Administration",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest", "behave"],
    },
    entry_points={
        "console_scripts": [
            "constellix=constellix_client.cli.main:main",
        ],
    },
    include_package_data=True,
    package_data={
        "constellix_client": ["*.yaml", "*.yml"],
    },
)
