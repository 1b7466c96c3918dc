from setuptools import find_packages, setup


setup(
    name="flagalias",
    version="0.1.0",
    description="Alias generation for feature-flag code reference scanning",
    author="GAHEOS",
    python_requires=">=3.11",
    package_dir={"": "src"},
    packages=find_packages("src"),
    extras_require={"test": ["pytest>=7"]},
)
