"""
Setup script for the card-czar package.

The engine, card handling and agent client live under src/card_czar.
The bundled card pack ships as package data.
"""

from setuptools import setup, find_packages

setup(
    name="card-czar",
    version="1.0.0",
    description="Card Czar - party card game round engine with LLM-driven bot seats",
    author="Card Czar Maintainers",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "anthropic>=0.18.0",
        "openai>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "card_czar._cards": ["data/*.json"],
    },
    entry_points={
        "console_scripts": [
            "card-czar=card_czar.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
