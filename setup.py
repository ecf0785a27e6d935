from setuptools import setup, find_packages


setup(
    name="wadmake",
    version="0.1",
    packages=find_packages(include=["wadmake", "wadmake.*"]),
    description="Read, write, and script WAD lump containers.",
    author="wadmake contributors",
    python_requires=">=3.8",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "wadmake=wadmake.cli:main",
        ]
    },
)
