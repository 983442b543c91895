from setuptools import setup, find_packages

setup(
    name="firebase-kmp-setup",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        'python-dotenv>=1.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
            'pytest-mock>=3.11.1',
        ],
    },
    entry_points={
        'console_scripts': [
            'firebase-setup=firebase_setup.main:run',
        ],
    },
)
