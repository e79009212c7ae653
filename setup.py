import os

from setuptools import setup, find_packages

VERSION = None

with open(os.path.join("additional_slots", "version.py"), "r") as version_fp:
    exec(version_fp.read())

if VERSION is None:
    raise ValueError("Unable to read additional_slots version!")

REQUIREMENTS = [

    "psutil>=5.8.0",
]

TEST_REQUIREMENTS = [

    "pytest>=7.0",
]


setup(

    name="additional-slots",
    version=VERSION,
    description="Generate a ui_chara_db.prcxml patch for the costume slots used by a mods directory.",
    packages=find_packages(include=["additional_slots", "additional_slots.*"]),
    package_data={"additional_slots": ["data/*.prc"]},
    python_requires=">=3.9",
    install_requires=REQUIREMENTS,
    extras_require={"test": TEST_REQUIREMENTS},
    entry_points={"console_scripts": ["additional-slots=additional_slots.__main__:main"]},
)
