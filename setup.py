#!/usr/bin/env python3
"""
Setup script for RFC2136 Provider package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="rfc2136-provider",
    version="1.0.0",
    author="RFC2136 Provider Team",
    author_email="team@example.com",
    description="DNS record management over RFC2136 dynamic updates with TSIG",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/rfc2136-provider",
    packages=find_packages(include=["rfc2136_provider", "rfc2136_provider.*"]),
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
            "rfc2136-provider=rfc2136_provider.cli.main:main",
        ],
    },
    include_package_data=True,
)
