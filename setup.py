from setuptools import setup, find_packages
from pathlib import Path

here = Path(__file__).parent

setup(
    name="media_annotation",
    version=(here / "media_annotation" / "VERSION").read_text().strip(),
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"media_annotation": ["VERSION"]},
    install_requires=[
        "numpy",
        "easydict",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["media_annotation = media_annotation.cli:main"],
    },
)
