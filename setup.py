# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="bloaty-metafile",
    version="0.3.0",
    description="Convert bloaty size reports into esbuild metafiles attributed by crate and dependency chain",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["bloaty_metafile*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'bloaty-metafile=bloaty_metafile.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
