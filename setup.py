"""Setup script for catinfer."""
from setuptools import setup, find_packages  # type: ignore
import catinfer

setup(
    name='catinfer',
    version=catinfer.version,
    description='Stack-effect type inference for Cat-like concatenative languages',  # noqa
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Compilers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.9',
    ],
    keywords='concatenative type-inference cat',
    packages=find_packages(),  # type: ignore
    python_requires='>=3.9',
    install_requires=[
        'parsy>=1.3.0,<3',
        'typing-extensions>=4',
    ],
    extras_require={
        'test': ['coverage>=6.4.4', 'hypothesis>=6'],
        'dev': ['axblack==20220330', 'mypy>=1.1.1', 'pre-commit>=2.6.0,<3'],
    },
)
