#!/usr/bin/env python3
"""
Setup script for SkyVault.
"""

from setuptools import setup, find_packages

requirements = [
    "grpcio>=1.60.0",
    "momento-wire-types>=0.119.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "loguru>=0.7.0",
    "prometheus-client>=0.19.0",
    "PyJWT>=2.8.0",
    "PyYAML>=6.0",
]

setup(
    name="skyvault-sdk",
    version="0.1.0",
    author="Yobie Benjamin",
    author_email="yobie@example.com",
    description="Async Python SDK for the SkyVault cache, topics and leaderboard service",
    long_description=(
        "Async client for SkyVault caches, collections, topics, leaderboards "
        "and token generation over gRPC."
    ),
    long_description_content_type="text/plain",
    url="https://github.com/yourusername/skyvault",
    packages=find_packages(include=["skyvault", "skyvault.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: AsyncIO",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
