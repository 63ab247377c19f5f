"""Setup for the assignment points extension."""

from setuptools import setup, find_packages

setup(
    name="points_extension",
    version="0.1.0",
    description="Inline point annotations and per-document point totals for assignment documents",
    long_description=open("README.md", encoding="utf-8").read() if __import__("pathlib").Path("README.md").exists() else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests*", "data*"]),
    python_requires=">=3.10",
    install_requires=[
        "streamlit>=1.28.0",
        "pydantic>=2.0.0",
        "plotly>=5.18.0",
        "pandas>=2.0.0",
        "pyyaml>=6.0",
        "markdown-it-py>=3.0.0",
        "mdit-py-plugins>=0.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "points-streamlit=ui.streamlit_app:main",
        ],
    },
)
