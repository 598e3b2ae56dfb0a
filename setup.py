from setuptools import setup, find_packages

setup(
    name='git-sdk-fetch',
    version='0.1.0',
    description='Resolve and download Git for Windows SDK artifacts',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'requests',
        'rich',
        'platformdirs',
        'PyYAML',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-mock',
        ],
    },
    entry_points={
        'console_scripts': [
            'git-sdk-fetch=gitsdk.cli:main',
        ],
    },
)
