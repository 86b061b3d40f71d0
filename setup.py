# setup.py
from setuptools import setup, find_packages

setup(
    name="shadow_ssr",
    version="0.1.0",
    description="Server-side rendering of web components into declarative shadow DOM",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.12",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.0",
        "aiohttp>=3.8",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "shadow-ssr=shadow_ssr.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
