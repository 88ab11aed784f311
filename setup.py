# setup.py
from setuptools import find_packages, setup

setup(
    name="gym-finder",
    version="0.1.0",
    packages=find_packages(include=["gymfinder", "gymfinder.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "httpx",
        "pydantic>=2",
        "pydantic-settings",
        "sentry-sdk",
        "structlog",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "python-dotenv",
        ],
    },
    entry_points={"console_scripts": ["gymfinder=gymfinder.cli:main"]},
)
