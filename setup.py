from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="trail-tagger",
    version="0.1.0",
    author="Your Organization",
    author_email="trail-tagger@your-org.com",
    description="Derive resource ARNs and tags from AWS CloudTrail events",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/your-org/trail-tagger",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "boto3>=1.26.0",
        "botocore>=1.29.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "python-dateutil>=2.8.0",
        "colorlog>=6.7.0",
        "jq>=1.6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.2.0",
            "pytest-cov>=4.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "trail-tagger=trail_tagger.cli.main:cli",
        ],
    },
)
