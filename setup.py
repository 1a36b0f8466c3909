from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="near-exporter",
    version="1.0.0",
    description="Prometheus exporter for NEAR validator set and sync state",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="NEAR Exporter Team",
    packages=find_packages(exclude=["examples", "near_exporter.tests"]),
    install_requires=[
        "requests>=2.27.0",
        "click>=8.0.0",
        "urllib3>=1.26.0",
        "prometheus_client>=0.17.0"
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.0.0",
            "black>=21.0.0",
            "flake8>=3.8.0",
            "mypy>=0.800"
        ]
    },
    entry_points={
        'console_scripts': [
            'near-exporter=near_exporter.cli:cli',
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: System :: Monitoring",
        "Topic :: System :: Networking :: Monitoring",
    ],
)
