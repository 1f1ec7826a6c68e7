from setuptools import setup, find_packages

setup(
    name="gate-operations",
    version="0.1.0",
    packages=find_packages(exclude=("tests", "integration_test")),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "scipy",
        "qiskit",
        "sympy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
)
