from setuptools import find_packages, setup

setup(
    name="gcpfootprint",
    version="1.0.0",
    description="Inventory a Google Cloud project's resources into a text report",
    license="MIT",
    packages=find_packages(exclude=["tests*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0.1",
        "click>=8.1.0",
        "rich>=13.0.0",
        "jinja2>=3.1.0",
        "google-api-core>=2.11.0",
        "google-auth>=2.20.0",
        "google-api-python-client>=2.90.0",
        "google-cloud-compute>=1.14.0",
        "google-cloud-container>=2.30.0",
        "google-cloud-iam>=2.12.0",
        "google-cloud-resource-manager>=1.10.0",
        "google-cloud-storage>=2.10.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "gcpfootprint=gcpfootprint.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: System :: Systems Administration",
    ],
)
