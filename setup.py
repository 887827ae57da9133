from setuptools import setup, find_packages

with open("README.md", encoding="utf-8") as readme_file:
    README = readme_file.read()

REQUIREMENTS = [
    "Babel >= 2.14",
    "Click >= 8.0",
    "PyYAML >= 3.13",
    "tabulate >= 0.8.2",
]

# Extra dependencies.
EXTRAS = {
    "dev": [
        "pylint",
        "bandit",
        "sphinx",
        "sphinx-click",
        "sphinx_rtd_theme",
        "numpydoc",
    ]
}

setup(
    name="unitformat",
    use_scm_version={
        "write_to": "unitformat/_version.py",
        "fallback_version": "0.1.0",
    },
    description="Unit prefix selecting number formatter and parser",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={
        "unitformat.config": ["unitformat.yaml.dist", "unitformat.yaml.dist.default"]
    },
    entry_points={
        "console_scripts": [
            "%s = unitformat.__main__:cli" % "unitformat"
        ]
    },
    install_requires=REQUIREMENTS,
    extras_require=EXTRAS,
    setup_requires=["setuptools_scm"],
    python_requires=">=3.9",
    license="Apache-2.0",
    zip_safe=False,
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Internationalization",
        "Topic :: Text Processing",
    ]
)
