"""
A setuptools based setup module.

See:
https://packaging.python.org/guides/distributing-packages-using-setuptools/
"""

import setuptools

PACKAGE_DATA = {
    "reactions": ["data/*.txt"],
}

INSTALL_REQUIRES = [
    "attrs",
    "particle",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest",
    ],
}


def long_description():
    """Parse long description from the package docstring."""
    with open("src/reactions/__init__.py", "r") as init_file:
        return init_file.read().split('"""')[1]


setuptools.setup(
    name="reactions",
    version="0.1.0",
    description="Parse and compare particle reactions and decays",
    long_description=long_description(),
    long_description_content_type="text/x-rst",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    license="GPLv3 or later",
    python_requires=">=3.6",
    tests_require=EXTRAS_REQUIRE["test"],
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    package_data=PACKAGE_DATA,
    include_package_data=True,
)
