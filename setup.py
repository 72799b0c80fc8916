from setuptools import setup, find_packages

setup(
    name="pathcalc",
    version="0.1.0",
    description="Uniform point and speed calculation for Bezier robot paths",
    packages=find_packages(include=["pathcalc", "pathcalc.*"]),
    py_modules=["main", "doctor"],
    install_requires=[
        "pygame>=2.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pathcalc = main:main",
        ],
    },
    python_requires=">=3.8",
)
