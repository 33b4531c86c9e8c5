from setuptools import find_namespace_packages, setup  # type: ignore
from version import __version__

setup(
    name="unwrapping",
    version=__version__,
    packages=find_namespace_packages(include=["unwrapping", "unwrapping.*"]),
    package_data={"unwrapping": ["py.typed"]},
    python_requires=">=3.11",
    extras_require={
        "pytest": ["pytest"],
        "test": ["pytest<9", "pytest-asyncio"],
    },
    license="Apache 2.",
    description="See through wrapped exceptions and summarize exception trees",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
