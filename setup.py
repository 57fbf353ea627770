from setuptools import setup, find_packages


setup(
    name="zipembed",
    version="1.1.0",
    packages=find_packages(include=["zipembed", "zipembed.*"]),
    description="Bundle a file or directory tree into a Go or Python source file as embedded zip data.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "zipembed=zipembed.cli:main",
        ]
    },
)
