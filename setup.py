# setup.py
from setuptools import setup, find_packages

setup(
    name="foldertree",
    version="1.0.0",
    description="Scan directory trees into queryable descriptors and scaffold them from declarative specs",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'foldertree=foldertree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
