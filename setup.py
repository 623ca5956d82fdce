import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='pngpong',
    version='0.1.0',
    description='Hide, read and remove messages in custom PNG chunks.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    package_data={'pngpong.kernel': ['*.pyi']},
    install_requires=[
        'deal',
        'parse',
        'PyYAML',
        'typer',
    ],
    extras_require={
        'test': ['pytest', 'Pillow'],
    },
    entry_points={
        'console_scripts': ['pngpong=pngpong.runner:app'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Utilities'
    ],
    python_requires='>=3.8',
    keywords='png chunk steganography message encode decode crc'
)
