from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="roadnet",
    version="0.3.0",
    author="Andrey Golovanov",
    description="A library for settlement road network planning and routing.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/networmix/roadnet",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "dev", "examples", "notebooks")),
    python_requires=">=3.9",
    install_requires=["numpy", "networkx"],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest", "networkx"],
)
