from setuptools import setup, find_packages

setup(
    name="threadrite",
    author="Sanic Community",
    author_email="tronic@noreply.users.github.com",
    description="Bordered text reports of blocked threads, locks and exceptions",
    long_description=open("README.md", encoding="UTF-8").read(),
    long_description_content_type="text/markdown",
    use_scm_version={"fallback_version": "0.1.0"},
    setup_requires=["setuptools_scm"],
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.9",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=["html5tagger>=1.2.1"],
    extras_require={
        "test": ["pytest", "coverage", "beautifulsoup4"],
    },
    include_package_data=True,
)
