# src/kitflow/__init__.py
"""
Kitflow — núcleo de orquestração de builds de Kits.

Este pacote raiz define o namespace público do Kitflow, o núcleo de um
control loop que transforma a especificação de um Kit em uma imagem de
container executável por meio de um pipeline de build plugável, e que
propaga a conclusão para as Integrations dependentes.

Princípios centrais:
    - O ciclo de vida de um Kit é uma máquina de estados explícita
    - Cada passada de reconciliação executa no máximo uma Action
    - Handlers são idempotentes e seguros para reexecução
    - Todo efeito colateral é persistido via store de recursos

Arquitetura em alto nível:
    - core.resources → tipos de recursos, store e utilitários de ownership
    - core.config    → carregamento, merge e hashing de configuração
    - core.pipeline  → Steps, catálogo de runtime e composição do Environment
    - core.engine    → dispatcher de Actions, Initialize, Build e fan-out

Limites explícitos:
    - Não executa builds de imagem (executores são externos)
    - Não valida schema nem admissão de recursos
    - Não agenda jobs de build em nós de computação

Este módulo existe para estabelecer o namespace do Kitflow.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
