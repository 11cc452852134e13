# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="vfxstructor",
    version="1.0.0",
    description="Herramienta para crear y gestionar estructuras de carpetas de proyectos VFX",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["vfxstructor*"]),
    python_requires=">=3.9",
    install_requires=[
        "customtkinter",  # Portapapeles del sistema (copy-path)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'vfxstructor=vfxstructor.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
