import numpy as np

from mlkit import GaussianNB, Labeled, SoftmaxClassifier


def generate_blobs(n, n_classes, n_features, spread=3.0, seed=0):
    rs = np.random.RandomState(seed)
    centers = spread * rs.randn(n_classes, n_features)
    samples, labels = [], []
    for label, center in enumerate(centers):
        samples.extend((center + rs.randn(n, n_features)).tolist())
        labels.extend([label] * n)
    return Labeled(samples, labels)


def test(n_classes, n_features, epochs, layer="multiclass"):
    train = generate_blobs(100, n_classes, n_features, seed=n_classes)
    test_set = generate_blobs(25, n_classes, n_features, seed=n_classes)

    # stream the training set through the naive Bayes estimator in 4 chunks
    nb = GaussianNB()
    shuffled = train.randomize()
    chunk = len(train) // 4
    for start in range(0, len(shuffled), chunk):
        nb.partial(shuffled.batch(start, start + chunk))
    nb_preds = nb.predict(test_set)

    net = SoftmaxClassifier(layer=layer, epochs=epochs, batch_size=32, seed=0)
    net.fit(train, validation=test_set)
    net_preds = net.predict(test_set)

    print(f"{n_classes} classes, {n_features} features:")
    print(f"  GaussianNB accuracy:        {np.mean(np.array(nb_preds) == test_set.labels) * 100:.2f}%")
    print(f"  SoftmaxClassifier accuracy: {np.mean(np.array(net_preds) == test_set.labels) * 100:.2f}%")


if __name__ == "__main__":
    test(n_classes=2, n_features=2, epochs=50)
    test(n_classes=3, n_features=4, epochs=100)
    test(n_classes=5, n_features=8, epochs=100, layer="softmax")
