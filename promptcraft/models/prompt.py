from promptcraft.extensions import db


class Prompt(db.Model):
    """A prompt owned by exactly one collection.

    `order` is the zero-based display position inside the collection. Rows are
    removed together with their collection, either by the storage layer or by
    the database through ON DELETE CASCADE.
    """

    __tablename__ = 'prompts'
    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    collection_id = db.Column(
        db.Integer,
        db.ForeignKey('collections.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    order = db.Column('order', db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            "id": self.id,
            "content": self.content,
            "collectionId": self.collection_id,
            "order": self.order,
        }

    def __repr__(self):
        return f'<Prompt {self.id} collection={self.collection_id} order={self.order}>'
