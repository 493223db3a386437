"""Setup script for PlannerBot."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read requirements, routing test tooling to the dev extra
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
dev_requirements = []

if requirements_file.exists():
    content = requirements_file.read_text().strip()

    for line in content.split("\n"):
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        if "pytest" in line:
            dev_requirements.append(line)
        else:
            requirements.append(line)

setup(
    name="plannerbot",
    version="1.0.0",
    description="Recurring task expansion and day-indexed calendar views for a personal planner",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PlannerBot Team",
    author_email="support@plannerbot.local",
    # Package configuration
    packages=find_packages(include=["plannerbot", "plannerbot.*"]),
    include_package_data=True,
    # Dependencies
    install_requires=requirements,
    extras_require={
        "dev": dev_requirements,
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Scheduling",
    ],
    keywords="planner tasks recurrence calendar scheduling",
    entry_points={
        "console_scripts": [
            "plannerbot=plannerbot.cli:main",
        ],
    },
    zip_safe=False,
)
