# !/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name='typedmodel',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
      'marshmallow>=3.0.0',
      'attrs>=19.1.0',
      'jsonschema>=4.18.0',
    ],
    extras_require={
      'test': ['pytest'],
    },
    python_requires='>=3.8',
    version='0.1.0',
    description='JSON schema driven models for Python',
    license='BSD',
    keywords=['jsonschema', 'models', 'serialization'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development',
    ],
)
