# src/kitflow/core/__init__.py
"""
Core do Kitflow.

Este pacote reúne a implementação canônica do controle de builds de Kits:
máquina de estados do Kit, composição do pipeline de build e fan-out
de prontidão para Integrations dependentes.

Componentes principais:
    - resources → modelo de dados, store de recursos e ownership
    - config    → resolução de configuração (merge, validação, hashing)
    - pipeline  → Steps, catálogo e composição do Environment
    - engine    → dispatcher de Actions e handlers de fase

Princípios fundamentais:
    - Nenhuma decisão silenciosa: toda transição é registrada
    - Estado observável apenas via status dos recursos
    - Retentativas pertencem ao loop externo, nunca ao core

Este pacote existe como a fonte de verdade operacional do Kitflow.
"""
