"""Setup configuration for the stock-reconciled cart service."""

from setuptools import setup, find_packages

setup(
    name="rocketshoes-cart-service",
    version="1.0.0",
    description="Shopping cart that reserves inventory stock for every unit it holds",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "redis>=5.0.0",
        "confluent-kafka>=2.3.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "httpx>=0.26.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
)
