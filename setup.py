"""
Auto Commit セットアップスクリプト
"""

from setuptools import setup, find_packages
from pathlib import Path

# README.mdの内容を読み込み
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8') if (this_directory / "README.md").exists() else ""

setup(
    name="auto-commit",
    version="1.0.0",
    author="Nicholas Ferreira",
    description="Automagically generate commit messages.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="auto-commit"),
    package_dir={"": "auto-commit"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Version Control :: Git",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31.0",
        "colorlog>=6.7.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-mock>=3.11.1",
            "pytest-cov>=4.1.0",
            "black>=23.7.0",
            "flake8>=6.0.0",
            "mypy>=1.5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "auto-commit=auto_commit.main:main",
        ],
    },
    zip_safe=False,
)
