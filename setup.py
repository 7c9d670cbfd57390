from setuptools import setup, find_packages

setup(
    name="runc",
    version="1.0.0",
    description="Run C source files like scripts, compiling them once into a content-addressed cache",
    packages=find_packages(exclude=["test", "test.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["runc=runc._cli:main"]},
)
