from setuptools import setup, find_packages

setup(
    name='blood-interpreter',
    version='0.1.0',
    description='Blood language interpreter: lexer, parser and tree-walking evaluator',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=9.0'
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'blood = blood.cli.main:main'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
