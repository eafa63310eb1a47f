"""
Setup configuration for the chart-indicators package
"""

from setuptools import setup, find_packages

# Read long description from README
def read_long_description():
    try:
        with open("README.md", "r", encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError:
        return "Technical-analysis series (SMA, EMA, Bollinger Bands, RSI, Stochastic) for price charts"

setup(
    name="chart-indicators",
    version="1.0.0",
    author="Chart Indicators Team",
    description="Technical-analysis indicator engine producing chart-ready series from daily OHLCV bars",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src", exclude=["*.egg-info", "__pycache__"]),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Financial :: Investment",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Typing :: Typed",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.3.0",
        "numba>=0.56.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
            "mypy>=0.991",
        ],
    },
    include_package_data=True,
    package_data={
        "chart_indicators": ["py.typed"],
    },
    zip_safe=False,
    keywords=[
        "trading", "technical-analysis", "indicators", "bollinger-bands",
        "rsi", "stochastic", "moving-average", "charts", "numpy", "pandas",
    ],
)
