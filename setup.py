from setuptools import find_packages, setup


setup(
    name="network-graph-engine",
    version="0.1.0",
    description="Network graph filtering and community clustering engine for visualization front ends",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "prometheus-client>=0.17.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
)
