from setuptools import setup

setup(
    name="projinit",
    version="0.1.0",
    description="Generate project scaffolding from templates.",
    packages=["projinit", "projinit.commands"],
    package_data={
        "projinit": ["templates/**/*", "templates/*/root/**/.*"],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0.0",
        "click>=8.0",
        "jinja2>=3.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pyfakefs>=5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "projinit=projinit.__main__:main",
        ]
    },
  )
