from setuptools import setup

setup(
    name="scanserver",
    version="1.0.0",
    description="Scan images from SANE devices into PNG, JPEG or TIFF files",
    packages=["scanserver"],
    python_requires=">=3.8",
    install_requires=[
        "Pillow",
        "numpy",
    ],
    extras_require={
        # The _sane extension needs the SANE headers to build.
        "sane": ["python-sane"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["scanserver = scanserver.cli:main"],
    },
)
