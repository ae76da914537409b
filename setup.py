from setuptools import setup, find_packages

setup(
    name="prefix-tools",
    version="1.0.0",
    description="Batch filename prefixing with backup, retry, quarantine and a CSV audit log",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
        "tqdm>=4.60",
        "rich>=12.0",
        "argcomplete>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "file-prefix = prefixer.cli:main",
            "prefix-config = common.shared.loader:cli_main",
        ],
    },
)
