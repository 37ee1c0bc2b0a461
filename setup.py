import setuptools

setuptools.setup(
    name="virtual_business_cards",
    version="0.2",
    description="Virtual Business Cards: browse, sort and search received business cards",
    packages=["models", "repositories", "services", "controllers", "utils"],
    py_modules=["main"],
    classifiers=["Programming Language :: Python :: 3"],
    python_requires=">=3.11",
    install_requires=[
        "loguru",
        "pymongo",  # Document database holding received cards and tags
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["business-cards=main:main"],
    },
)
