# sistemas/avaliacao_pcd/__init__.py
"""
Sistema de Avaliação PCD (Pessoa com Deficiência)

Análise de completude de laudos médicos, decisão de enquadramento segundo a
Lei 13.146/2015 e emissão do Laudo Caracterizador.
"""
