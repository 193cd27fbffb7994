"""
Setup script for bwai-shotgun package with Cython compilation.

This builds the internal modules (_*/*.py) as compiled extensions,
while keeping the public API (config.py, runner.py, types.py, errors.py,
cli.py) as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import os

# Check if Cython is available
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False
    print("Cython not found. Building without compilation (source only).")

# Internal modules to compile with Cython
CYTHON_MODULES = [
    "src/bwai_shotgun/_match/binary.py",
    "src/bwai_shotgun/_match/orchestrator.py",
    "src/bwai_shotgun/_match/polling.py",
    "src/bwai_shotgun/_match/prepared_bot.py",
    "src/bwai_shotgun/_match/supervisor.py",
    "src/bwai_shotgun/_launch/base.py",
    "src/bwai_shotgun/_launch/bwapi_ini.py",
    "src/bwai_shotgun/_launch/headless.py",
    "src/bwai_shotgun/_launch/injected.py",
    "src/bwai_shotgun/_shared/game_table.py",
    "src/bwai_shotgun/_shared/logging_config.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    if not USE_CYTHON:
        return []

    extensions = []
    for module_path in CYTHON_MODULES:
        if os.path.exists(module_path):
            # Convert path to module name: src/bwai_shotgun/_match/foo.py -> bwai_shotgun._match.foo
            module_name = module_path.replace("src/", "").replace("/", ".").replace(".py", "")
            extensions.append(
                Extension(
                    name=module_name,
                    sources=[module_path],
                )
            )
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized if Cython is available."""
    extensions = get_extensions()
    if not extensions:
        return []

    return cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "boundscheck": False,
            "wraparound": False,
        },
        nthreads=os.cpu_count() or 1,
    )


# Only add ext_modules if we have Cython
ext_modules = get_ext_modules() if USE_CYTHON else []

setup(
    name="bwai-shotgun",
    version="0.1.0",
    description="Run local StarCraft: Brood War bot matches with BWAPI",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "psutil>=5.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "cython>=3.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "bwai-shotgun=bwai_shotgun.cli:main",
            "bwai-game-table=bwai_shotgun.cli:dump_game_table",
        ],
    },
    # Include compiled .so/.pyd files in the package
    package_data={
        "bwai_shotgun": ["*.so", "*.pyd", "_*/*.so", "_*/*.pyd"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
        "Topic :: Games/Entertainment :: Real Time Strategy",
    ],
)
