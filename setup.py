"""
Setup script para instalação do serviço de Avaliação PCD.

Este arquivo permite instalar o projeto em modo editable para desenvolvimento:
    pip install -e .[test]

Isso adiciona o projeto ao PYTHONPATH e permite imports como:
    from sistemas.avaliacao_pcd.classifier import KeywordClassifier
"""

from setuptools import setup, find_namespace_packages

setup(
    name="avaliacao-pcd",
    version="1.0.0",
    description="Avaliação PCD - análise documental, elegibilidade e Laudo Caracterizador",
    # sistemas/ e utils/ não têm __init__.py (namespace packages)
    packages=find_namespace_packages(
        include=["middleware*", "services*", "sistemas*", "utils*"],
    ),
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "pydantic>=2.5",
        "structlog>=24.1",
        "python-dotenv>=1.0",
        "pytz>=2024.1",
        "httpx>=0.27",
        "PyMuPDF>=1.24",
        "python-docx>=1.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
