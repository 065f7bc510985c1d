"""
Setup script for the KNN decision boundary visualization.

To install for development:
    pip install -e .[test]

To install:
    pip install .

To render frames after installing:
    python knn_boundary_animation.py penguins.csv --k-max 30
"""

from setuptools import setup

# Setup configuration
setup(
    name='knn_boundary',
    version='1.0.0',
    description='KNN decision boundary visualization over a hexagonal grid',
    author='KNN Boundary Team',
    packages=['knn_boundary'],
    py_modules=['knn_boundary_animation'],
    install_requires=[
        'numpy>=1.20.0',
        'pandas>=1.3.0',
        'matplotlib>=3.5.0',
        'psutil>=5.8.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.8',
    zip_safe=False,
)
