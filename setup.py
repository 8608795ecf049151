from setuptools import setup, find_packages

setup(
    name="kvbench",
    version="0.1.0",
    description="Key-value store benchmark: workload synthesis, replay and latency reports",
    author="kvbench Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"configs": ["*.yaml"]},
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "pyyaml>=6.0",
        "matplotlib>=3.7.0",
        "seaborn>=0.12.0",
        "tqdm>=4.65.0",
        "dataclasses-json>=0.6.0",
        "jsonschema>=4.0.0",
        "lmdb>=1.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "kvbench=kvbench.main:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
