from setuptools import setup, find_packages

VERSION = '0.1.0'

setup(
    name="taskflow",
    version=VERSION,
    description="Project scoped task mutations with realtime fan-out for Django",
    packages=find_packages(include=['taskflow', 'taskflow.*']),
    install_requires=[
        'Django>=4.2',
        'channels>=4',
        'channels-redis>=4.1',
        'djangorestframework>=3',
        'daphne>=4.1.0',
        'pytz',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-django',
        ],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
