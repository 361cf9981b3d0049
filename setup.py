#!/usr/bin/env python
from setuptools import setup
setup(
    name='parseresource',
    version='1.0',
    description='an object mapper for the Parse REST API',
    author='Six Apart Ltd.',
    author_email='python@sixapart.com',

    packages=['parseresource'],
    provides=['parseresource'],
    python_requires='>=3.7',
    install_requires=['simplejson>=2.0.0', 'httplib2>=0.4.0'],
    extras_require={
        'test': ['mock', 'pytest'],
    },
)
