"""gridmeasures/deployment — serving the indices over HTTP."""
