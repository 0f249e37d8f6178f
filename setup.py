# setup.py
from setuptools import setup, find_packages

setup(
    name="fin_scout",
    version="0.1.0",
    description="FinScout: Firecrawl-обход финансовых сайтов и демо-котировки в терминале",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.2",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "fin_scout=fin_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
