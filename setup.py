from setuptools import setup, find_packages

with open("dicomjson/version.py") as version_file:
    exec(version_file.read())

setup(
    name="dicomjson",
    version=__version__,
    packages=find_packages(exclude=["test", "test.*"]),
    install_requires=["pydicom>=3.0", "numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["dicomjson = dicomjson.cli:cli"]},
    description="Convert parsed DICOM datasets into filterable JSON-like mappings",
)
