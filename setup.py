# setup.py
from setuptools import setup, find_packages

setup(
    name="site_fetcher",
    version="0.1.0",
    description="Recursive website content fetcher: crawl, extract, digest",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_fetcher.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site-fetcher=site_fetcher.cli:cli"],
    },
    python_requires=">=3.11",
)
