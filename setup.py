"""Python setup.py for sos_envelopes package"""
import io
import os
from setuptools import find_packages, setup


def read(*paths, **kwargs):
    """Read the contents of a text file safely.
    >>> read("sos_envelopes", "VERSION")
    '0.1.0'
    >>> read("README.md")
    ...
    """

    content = ""
    with io.open(
        os.path.join(os.path.dirname(__file__), *paths),
        encoding=kwargs.get("encoding", "utf8"),
    ) as open_file:
        content = open_file.read().strip()
    return content


def read_requirements(path):
    return [
        line.strip()
        for line in read(path).split("\n")
        if not line.startswith(('"', "#", "-", "git+"))
    ]


setup(
    name="sos_envelopes",
    version=read("sos_envelopes", "VERSION"),
    description="Sum-of-squares instances for lower envelopes of univariate polynomials",
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", ".github"]),
    package_data={"sos_envelopes": ["VERSION"]},
    install_requires=read_requirements("requirements.txt"),
    entry_points={
        "console_scripts": ["sos_envelopes = sos_envelopes.__main__:main"]
    },
    extras_require={"test": read_requirements("requirements-test.txt")},
)
