"""
dfr-browser core package.

Modules
───────
models    : Pydantic data models (ModelMeta, Topic, Document, TopicModel)
errors    : Exception hierarchy shared by the loader, views and converter
loader    : Reads model_meta.json, keys.csv, dt.csv, cites.txt, uris.txt
ranking   : Top words, word → topic ranks, naive top documents per topic
views     : BrowserSession and the overview / topic / word / doc views
count2txt : CLI turning JSTOR wordcount CSVs into bag-of-words text
"""
