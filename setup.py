from setuptools import setup, find_packages

setup(
    name="fixcommit",
    version="1.0.0",
    packages=find_packages(include=["fixcommit", "fixcommit.*"]),
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "GitPython",
        ],
    },
    entry_points={
        'console_scripts': [
            'fix-commit=fixcommit.cli:main',
            'quick-commit=fixcommit.cli:quick_main',
            'check-screenshots=fixcommit.screenshots:main',
        ],
    },
    author="Alaamer",
    author_email="",
    description="Re-stage stale git index entries before committing",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Version Control :: Git",
    ],
    python_requires=">=3.9",
)
