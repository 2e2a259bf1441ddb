"""Configuração do conector: settings por domínio e logging estruturado."""
