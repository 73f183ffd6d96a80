import os, re
from setuptools import setup, find_packages

PACKAGE_NAME = "invoker"

# Read the README file
with open("README.md", encoding="utf-8") as f:
    invoker_readme = f.read()

def read_file(filepath: str) -> str:
    """Read and return the content of a file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read().strip()

def get_dependencies() -> list:
    """Retrieve dependencies from the requirements file."""
    depfile = "requirements.txt"
    if os.path.exists(depfile):
        return [
            line.strip() for line in read_file(depfile).splitlines()
            if line.strip() and not line.startswith("#")
        ]
    return []

def get_version() -> str:
    """Retrieve the package version from the version components."""
    versionfile = os.path.join(PACKAGE_NAME, "_version.py")

    if os.path.exists(versionfile):
        verstrline = read_file(versionfile)
        parts = []
        for component in ("MAJOR", "MINOR", "PATCH"):
            match = re.search(rf"^VERSION_{component} = (\d+)", verstrline, re.M)
            if not match:
                raise RuntimeError(f"Unable to find VERSION_{component} in '_version.py'.")
            parts.append(match.group(1))
        suffix = re.search(r"^VERSION_SUFFIX = ['\"]([^'\"]*)['\"]", verstrline, re.M)
        version = ".".join(parts)
        if suffix and suffix.group(1):
            version += "-" + suffix.group(1)
        return version

    raise FileNotFoundError("Version file '_version.py' not found.")

extras_require = {
    # Testing dependencies
    "test": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "hypothesis>=6.88.0",
    ],
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "hypothesis>=6.88.0",
        "black>=23.0.0",
        "flake8>=6.0.0",
        "pyright>=1.1.0",
    ],
}

# Setup the package
if __name__ == '__main__':
    setup(
        name="invoker",
        version=get_version(),
        description="Invoke registered components' methods by name, with overload resolution and a method cache.",
        long_description=invoker_readme,
        long_description_content_type="text/markdown",
        license="MIT",
        packages=find_packages(include=[PACKAGE_NAME, f"{PACKAGE_NAME}.*"]),
        install_requires=get_dependencies(),
        extras_require=extras_require,
        python_requires=">=3.9",
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Libraries :: Python Modules",
        ],
        keywords="dispatch reflection registry plugin overload",
        entry_points={
            "console_scripts": [
                "invoker=invoker.__main__:main",
            ],
        },
    )
