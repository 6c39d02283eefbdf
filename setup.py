"""Install the onboarding form package."""

from setuptools import setup, find_packages

setup(
    name='arigo-onboarding',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    python_requires='>=3.8',
    install_requires=[
        "wtforms>=3.0",
        "email_validator",
        "werkzeug",
        "python-json-logger>=3.1",
    ],
    extras_require={
        'test': ["pytest"],
    },
    zip_safe=False
)
