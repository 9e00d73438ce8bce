from setuptools import setup, find_packages

setup(
    name='clustertopo',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer',
        'pydantic>=2',
        'PyYAML',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
            'jsonschema',
        ],
    },
    entry_points={
        'console_scripts': [
            'clustertopo=clustertopo.cli:app'
        ]
    },
    description='Control plane, network and config topology resolver for multi-cluster Kubernetes test environments',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
