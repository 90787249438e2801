# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- UI & REACTIVE ---
    # FletXr ships pre-releases only; install with: uv pip install FletXr --pre
    "flet",
    "FletXr",

    # --- STORE & MODELS ---
    "httpx>=0.27.0",            # Firebase Realtime Database REST client
    "pydantic>=2.0.0",

    # --- CONFIG ---
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",
]

setup(
    name="yala-carves-storefront",
    version="0.3.0",
    description="Yala Carves storefront dashboard",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"carves.shared.config": ["settings/*.yaml"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        # --- TESTS ---
        "test": [
            "pytest",
            "pytest-asyncio==1.3.0",
        ],
    },
    entry_points={
        "console_scripts": ["yala-carves=carves.storefront.main:run"],
    },
    python_requires=">=3.11",
)
