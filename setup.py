#!/usr/bin/env python
from setuptools import setup, find_packages

# Read requirements
with open('requirements.txt') as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setup(
    name="langchain-hana-nodes",
    version="0.1.0",
    description="SAP HANA Cloud vector store nodes for LangChain workflows",
    author="FinSights AP",
    author_email="info@finsightsap.com",
    packages=find_packages(include=["langchain_hana_nodes", "langchain_hana_nodes.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
