# src/kitflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline de build do Kitflow.

Componentes principais:
    - StepPhase → fase do pipeline de build à qual um Step pertence

Princípios fundamentais:
    - A fase é uma etiqueta, não uma prioridade: a ordem de execução é a
      ordem da sequência de Steps no Environment
    - Valores textuais são estáveis e adequados para persistência
"""

from __future__ import annotations

from enum import Enum


class StepPhase(str, Enum):
    """
    Fases do pipeline de build.

    Fases definidas:
        - INIT: preparação do diretório de trabalho
        - PROJECT_GENERATION: geração do descritor de projeto e dependências
        - PROJECT_BUILD: resolução e construção do projeto
        - APPLICATION_PACKAGE: empacotamento da aplicação
        - APPLICATION_PUBLISH: montagem e publicação da imagem final

    Invariantes:
        - Todo Step possui exatamente uma fase
        - Uma sequência de build válida possui exatamente um Step em
          APPLICATION_PUBLISH
    """
    INIT = "init"
    PROJECT_GENERATION = "project-generation"
    PROJECT_BUILD = "project-build"
    APPLICATION_PACKAGE = "application-package"
    APPLICATION_PUBLISH = "application-publish"
