from setuptools import setup, find_packages

setup(
    name="favqsCli",
    version="0.3.0",
    description="Command line client for the FavQs quote API",
    author="Your Name",
    author_email="you@example.com",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "requests>=2.31.0",
        "tabulate>=0.8.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "requests-mock>=1.11",
            "pytest-socket>=0.6",
        ],
    },
    entry_points={
        "console_scripts": ["favqs=favqsCli.cli:main"],
    },
    license="MIT",
)
