from setuptools import setup, find_packages

setup(
    name='column-labeler',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    license='MIT',
    description='Label every issue card in a GitHub project board column',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.10',
    install_requires=[
        'requests>=2.28.1',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'column-labeler=column_labeler.__main__:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Bug Tracking',
    ],
)
