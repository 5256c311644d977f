# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="levelog",
    version="1.0.0",
    description="Leveled logger with colored console output and exclusive, periodically flushed log files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["levelog", "levelog.*"]),
    python_requires=">=3.8",
    install_requires=[
        "colorama>=0.4.6",  # Console colors (just_fix_windows_console)
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
