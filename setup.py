# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="duplicacy2ncdu",
    version="0.1.0",
    description="Convert a Duplicacy enum-only debug log into an NCDU JSON export",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["duplicacy2ncdu*"]),
    package_data={"duplicacy2ncdu.interface.locales": ["*.json"]},
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
            "ijson",
        ],
    },
    entry_points={
        'console_scripts': [
            'duplicacy2ncdu=duplicacy2ncdu.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
        "Environment :: Console",
    ],
)
