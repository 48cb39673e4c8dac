"""
Setup script for the Trade Validator.
"""

from setuptools import setup, find_packages
import os

# Read the README file
long_description = ""
if os.path.exists("README.md"):
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()

# Read requirements
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Version
VERSION = "1.0.0"

setup(
    name="trade-validator",
    version=VERSION,
    author="Trade Validator Team",
    description="Concurrent rule-based validation of FX trades with reversible shutdown",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Financial and Insurance Industry",
        "Topic :: Office/Business :: Financial",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
        ],
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "trade-validator=trade_validator.cli:main",
            "trade-validation-service=trade_validator.services.validation.validation_service:run",
        ],
    },
    include_package_data=True,
    package_data={
        "trade_validator": [
            "configs/*.yaml",
        ],
    },
    zip_safe=False,
    keywords="trading, fx, validation, trade-validation, rules",
)
