from pathlib import Path

from setuptools import find_packages, setup

BASE_DIR = Path(__file__).parent
README = (BASE_DIR / "README.md").read_text(encoding="utf-8")

setup(
    name="clearspace-settings",
    version="0.1.0",
    description="Clearspace connection settings with write-through property persistence.",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Collaboration Integration",
    packages=find_packages(include=["clearspace_config", "clearspace_config.*"]),
    python_requires=">=3.9",
    include_package_data=True,
    install_requires=[
        "fastapi>=0.115.0",
        "pydantic>=2.0",
        "uvicorn[standard]>=0.32.0",
        "requests>=2.32.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "httpx>=0.27.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "clearspace-settings-service=clearspace_config.main:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
