# setup.py
from setuptools import setup, find_packages

setup(
    name="polite_crawler",
    version="0.1.0",
    description="Polite threaded single-host web crawler with a pluggable index",
    packages=find_packages(include=["polite_crawler", "polite_crawler.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "snowballstemmer>=2.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["polite-crawler=polite_crawler.cli:cli"],
    },
    python_requires=">=3.10",
)
