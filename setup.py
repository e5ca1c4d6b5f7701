from setuptools import setup, find_packages

setup(
    name="folkit",
    version="0.1.0",
    description="First-order logic reasoning core: normalisation, unification, resolution, chaining and term indexing",
    author="folkit Contributors",
    author_email="",

    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"folkit": ["configs/*.yaml"]},

    zip_safe=False,
    python_requires=">=3.8",

    install_requires=[
        "lark",
        "networkx",
        "pyyaml",
        "python-dotenv",
        "tqdm",
    ],

    extras_require={
        "test": [
            "pytest>=6.0",
            "pytest-cov",
        ],
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
    ],
)
