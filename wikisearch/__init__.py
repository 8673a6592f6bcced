"""
Краулер в ширину и булев поиск с ранжированием TF-IDF
"""
