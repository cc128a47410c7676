# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="wgslbundle",
    version="0.1.0",
    description="Flatten '#include \"path\"' trees of shader sources into a single file",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["wgslbundle*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'wgslbundle=wgslbundle.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
