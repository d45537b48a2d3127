from src.catalog_graph.cli import app

app(prog_name="catalog-graph")
