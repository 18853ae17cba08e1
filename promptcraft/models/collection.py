from promptcraft.extensions import db


class Collection(db.Model):
    __tablename__ = 'collections'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {"id": self.id, "title": self.title, "description": self.description}

    def __repr__(self):
        return f'<Collection {self.id} {self.title!r}>'
