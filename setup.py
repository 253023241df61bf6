#!/usr/bin/env python3
"""Setup script for MindPad."""

from setuptools import setup, find_packages

setup(
    name="mindpad",
    version="1.0.0",
    description="A radial mind map editor with undo history and Markdown notes",
    author="MindPad Project",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "mindpad": ["theme.css"],
    },
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "PyGObject>=3.46.0",
        "pycairo>=1.25.0",
        "Markdown>=3.4",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "mindpad=mindpad.launcher:main",
            "mindpad-cli=mindpad.cli:main",
        ],
        "gui_scripts": [
            "mindpad-gui=mindpad.launcher:main",
        ],
    },
    classifiers=[
        "Environment :: X11 Applications :: GTK",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: Office/Business",
    ],
)
